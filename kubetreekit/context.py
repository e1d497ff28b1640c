"""
Wiring of the KubeTreeKit components.

``create_context`` builds one resolver, path translator, executor, downloader
and installer from a configuration object. The context is passed by reference
to whatever needs it; there is no module-level instance.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from kubetreekit.config.parser import KubeTreeKitConfig
from kubetreekit.core.download import Downloader, DownloadProgress
from kubetreekit.core.paths import PathTranslator
from kubetreekit.core.platform import PlatformResolver
from kubetreekit.core.shell import ShellExecutor
from kubetreekit.tools.catalog import get_tool, list_tools
from kubetreekit.tools.installer import ArchiveInstaller
from kubetreekit.tools.orchestrator import InstallOrchestrator

logger = logging.getLogger(__name__)


@dataclass
class Context:
    """Components sharing one configuration and one platform view."""

    config: KubeTreeKitConfig
    resolver: PlatformResolver
    paths: PathTranslator
    executor: ShellExecutor
    downloader: Downloader
    installer: ArchiveInstaller

    def orchestrator(
        self,
        tool_name: str,
        notify: Optional[Callable[[int, str], None]] = None,
    ) -> InstallOrchestrator:
        """
        Create an orchestrator for one managed tool.

        Raises:
            UnknownToolError: If the tool is not in the catalog
        """
        return InstallOrchestrator(
            self.installer,
            self.executor,
            get_tool(tool_name, self.config),
            notify=notify,
        )


def create_context(
    config: Optional[KubeTreeKitConfig] = None,
    cwd: Optional[str] = None,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
) -> Context:
    """
    Build a Context from configuration.

    Args:
        config: Loaded configuration (default: built-in defaults)
        cwd: Working directory for spawned commands
        progress_callback: Download progress callback

    Returns:
        Ready-to-use Context
    """
    config = config or KubeTreeKitConfig()
    resolver = PlatformResolver(config)
    executor = ShellExecutor(
        resolver, tools=list_tools(), namespace=config.namespace, cwd=cwd
    )
    paths = PathTranslator(resolver)
    downloader = Downloader(progress_callback=progress_callback)
    installer = ArchiveInstaller(
        resolver,
        executor,
        downloader=downloader,
        namespace=config.namespace,
        paths=paths,
    )
    logger.debug(
        f"Platform {resolver.platform().value}, bridge mode "
        f"{'on' if resolver.bridge_mode_enabled() else 'off'}"
    )
    return Context(
        config=config,
        resolver=resolver,
        paths=paths,
        executor=executor,
        downloader=downloader,
        installer=installer,
    )


__all__ = ["Context", "create_context"]

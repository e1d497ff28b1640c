"""
Archive download and installation for managed tools.

This module orchestrates installing a tool from a release archive:
1. Resolve the download URL for the current platform
2. Create the install directory
3. Download the archive to a temporary file
4. Extract it with ``tar`` (natively or inside the WSL bridge)
5. Remove the temporary archive

Each step short-circuits on failure and the returned ``Failed`` result is
tagged with the stage that failed. A failed extraction leaves the archive
on disk for diagnosis.

No lock is taken: two concurrent installs of the same tool race on the same
install directory and the last writer wins.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from kubetreekit.core.directory import (
    DEFAULT_NAMESPACE,
    ensure_directory,
    get_install_folder,
)
from kubetreekit.core.download import Downloader
from kubetreekit.core.exceptions import UnknownToolError
from kubetreekit.core.paths import PathTranslator
from kubetreekit.core.platform import platform_label
from kubetreekit.core.result import (
    ErrorKind,
    Result,
    ShellResult,
    Succeeded,
    fail,
    failed,
)
from kubetreekit.tools.catalog import ManagedTool, get_tool

logger = logging.getLogger(__name__)


class ArchiveKind(Enum):
    """Supported release archive formats."""

    TAR = "tar"


@dataclass(frozen=True)
class DownloadSpec:
    """Where to fetch a tool from."""

    url_template: str
    archive_kind: ArchiveKind = ArchiveKind.TAR


@dataclass(frozen=True)
class InstallTarget:
    """Which tool to install, at which version, into which directory."""

    tool_name: str
    version: str
    install_directory: str


def resolve_url(spec: DownloadSpec, target: InstallTarget, platform) -> Result[str]:
    """
    Substitute {platform}, {version} and {tool} in the URL template.

    Args:
        spec: Download specification
        target: Install target providing the version and tool name
        platform: Effective Platform

    Returns:
        Succeeded with the concrete URL, or UNSUPPORTED_PLATFORM when the
        platform has no release label

    Example:
        >>> resolve_url(DownloadSpec("https://h/{tool}_{version}_{platform}.tar.gz"),
        ...             InstallTarget("t", "v1", "/x"), Platform.LINUX).value
        'https://h/t_v1_linux.tar.gz'
    """
    label = platform_label(platform)
    if label is None:
        return fail(
            ErrorKind.UNSUPPORTED_PLATFORM,
            f"No {target.tool_name} release is available "
            f"for platform '{platform.value}'",
        )

    url = (
        spec.url_template.replace("{platform}", label)
        .replace("{version}", target.version)
        .replace("{tool}", target.tool_name)
    )
    return Succeeded(url)


class ArchiveInstaller:
    """
    Downloads and extracts tool release archives.

    Attributes:
        resolver: PlatformResolver for platform and bridge mode
        executor: ShellExecutor used to run mkdir/tar
        downloader: Downloader used to fetch archives
        namespace: Application namespace for the install directory layout
        paths: PathTranslator mapping host paths into the bridge
    """

    def __init__(
        self,
        resolver,
        executor,
        downloader: Optional[Downloader] = None,
        namespace: str = DEFAULT_NAMESPACE,
        paths: Optional[PathTranslator] = None,
    ):
        self.resolver = resolver
        self.executor = executor
        self.downloader = downloader or Downloader()
        self.namespace = namespace
        self.paths = paths or PathTranslator(resolver)

    def target_for(self, tool: ManagedTool) -> Result[InstallTarget]:
        """Build the InstallTarget of ``tool`` (CONFIG_UNAVAILABLE without a home)."""
        folder = get_install_folder(self.resolver, tool.name, self.namespace)
        if failed(folder):
            return folder
        return Succeeded(
            InstallTarget(
                tool_name=tool.name,
                version=tool.version,
                install_directory=folder.value,
            )
        )

    def install(self, spec: DownloadSpec, target: InstallTarget) -> Result[None]:
        """
        Download and extract a release archive into the target directory.

        Args:
            spec: Where to download from
            target: What to install and where

        Returns:
            Succeeded(None), or a Failed tagged UNSUPPORTED_PLATFORM,
            CONFIG_UNAVAILABLE, DOWNLOAD_FAILURE or EXTRACT_FAILURE
        """
        url = resolve_url(spec, target, self.resolver.platform())
        if failed(url):
            return url

        logger.info(
            f"Installing {target.tool_name} {target.version} "
            f"to {target.install_directory}"
        )

        if not self.resolver.bridge_mode_enabled():
            created = ensure_directory(target.install_directory)
            if failed(created):
                return created

        download = self.downloader.to_temp_file(url.value)
        if failed(download):
            return fail(
                ErrorKind.DOWNLOAD_FAILURE,
                f"Failed to download: error was {download.message}",
            )
        archive_file = download.value

        unpacked = self.unarchive(
            archive_file, target.install_directory, spec.archive_kind
        )
        if failed(unpacked):
            logger.info(f"Keeping downloaded archive for diagnosis: {archive_file}")
            return fail(
                ErrorKind.EXTRACT_FAILURE,
                f"Failed to unpack: error was {unpacked.message}",
            )

        try:
            Path(archive_file).unlink()
        except OSError as e:
            logger.warning(f"Could not remove temporary archive {archive_file}: {e}")

        logger.info(f"Installed {target.tool_name} in {target.install_directory}")
        return Succeeded(None)

    def unarchive(
        self,
        source_file: str,
        destination: str,
        archive_kind: ArchiveKind = ArchiveKind.TAR,
    ) -> Result[None]:
        """Extract ``source_file`` into ``destination``."""
        if archive_kind is not ArchiveKind.TAR:
            return fail(
                ErrorKind.EXTRACT_FAILURE, f"Unsupported archive kind: {archive_kind}"
            )
        return self.untar(source_file, destination)

    def untar(self, source_file: str, destination: str) -> Result[None]:
        """
        Extract a tar archive by running the host's or the bridge's ``tar``.

        The exit code of ``tar`` is the only success signal.
        """
        if self.resolver.bridge_mode_enabled():
            destination = self.paths.to_bridge_path(destination)
            made = self.executor.run(f'mkdir -p "{destination}"')
            message = _failure_message(made, "Unable to run mkdir")
            if message is not None:
                logger.error(f"Error making directory: {message}")
                return fail(
                    ErrorKind.EXTRACT_FAILURE, f"Error making directory: {message}"
                )
            source_file = self.paths.to_bridge_path(source_file)
        else:
            created = ensure_directory(destination)
            if failed(created):
                return fail(ErrorKind.EXTRACT_FAILURE, created.message)

        untarred = self.executor.run(f'tar -C "{destination}" -xf "{source_file}"')
        message = _failure_message(untarred, "Unable to run tar")
        if message is not None:
            logger.error(f"Error unpacking: {message}")
            return fail(ErrorKind.EXTRACT_FAILURE, f"Error unpacking: {message}")
        return Succeeded(None)

    def is_installed(self, tool: ManagedTool) -> bool:
        """
        Check whether the tool's binary exists in its install directory.

        In bridge mode the check runs inside WSL.
        """
        target = self.target_for(tool)
        if failed(target):
            return False

        binary = tool.binary_name(self.resolver.is_windows())
        folder = target.value.install_directory
        if self.resolver.bridge_mode_enabled():
            bridged = self.paths.to_bridge_path(folder)
            probe = self.executor.run(f'test -f "{bridged}/{binary}"')
            return probe.succeeded and probe.value.ok
        return (Path(folder) / binary).is_file()

    def install_tool(self, tool: ManagedTool) -> Result[None]:
        """Install ``tool`` using its catalog URL template."""
        target = self.target_for(tool)
        if failed(target):
            return target
        return self.install(DownloadSpec(tool.url_template), target.value)

    def install_if_missing(
        self, tool_name: str, url_template: Optional[str] = None, config=None
    ) -> Result[None]:
        """
        Install a catalog tool unless its binary is already present.

        Args:
            tool_name: Catalog name of the tool
            url_template: URL template overriding the catalog entry
            config: Optional configuration with per-tool overrides

        Returns:
            Succeeded(None) if present or installed, Failed otherwise
            (CONFIG_UNAVAILABLE for a tool missing from the catalog)
        """
        try:
            tool = get_tool(tool_name, config)
        except UnknownToolError as e:
            return fail(ErrorKind.CONFIG_UNAVAILABLE, str(e))

        if self.is_installed(tool):
            logger.debug(f"{tool_name} already installed")
            return Succeeded(None)

        target = self.target_for(tool)
        if failed(target):
            return target
        spec = DownloadSpec(url_template or tool.url_template)
        return self.install(spec, target.value)


def _failure_message(result: Result[ShellResult], fallback: str) -> Optional[str]:
    """Return the error text of a failed shell run, or None if it exited 0."""
    if failed(result):
        return result.message or fallback
    if not result.value.ok:
        return result.value.stderr.strip() or fallback
    return None


__all__ = [
    "ArchiveInstaller",
    "ArchiveKind",
    "DownloadSpec",
    "InstallTarget",
    "resolve_url",
]

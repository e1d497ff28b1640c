"""
Show command implementation.

Runs ``kubectl tree`` for one object, installing the plugin on demand, and
prints the tree or writes it as a highlighted HTML page.
"""

import logging

from kubetreekit.cli.utils import build_context, notify, report_failure
from kubetreekit.core.result import failed
from kubetreekit.kubectl import TreeRunner, resolve_kubeconfig
from kubetreekit.view.registry import ViewRegistry
from kubetreekit.view.render import render_page

logger = logging.getLogger(__name__)


def run(args, registry: ViewRegistry = None) -> int:
    """
    Run the show command.

    Args:
        args: Parsed command-line arguments
        registry: View registry to record the shown view in

    Returns:
        Exit code (0 for success)
    """
    context = build_context(args)
    if context is None:
        return 1

    registry = registry if registry is not None else ViewRegistry()
    runner = TreeRunner(context.orchestrator("kubectl-tree", notify=notify))
    kubeconfig = resolve_kubeconfig(
        context.resolver, explicit=args.kubeconfig, configured=context.config.kubeconfig
    )

    result = runner.run(args.kind, args.name, kubeconfig)
    if failed(result):
        report_failure(result)
        return 1

    resource = f"{args.kind}/{args.name}"
    view = registry.create_or_show(
        result.value.stdout,
        resource,
        lambda: runner.run(args.kind, args.name, kubeconfig),
    )

    if args.html:
        args.html.write_text(render_page(resource, view.content), encoding="utf-8")
        logger.info(f"Wrote {view.title} to {args.html}")
    else:
        print(view.content, end="" if view.content.endswith("\n") else "\n")
    return 0

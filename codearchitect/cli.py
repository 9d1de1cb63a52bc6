"""
Code Architect command line entry point.

Runs one ask/plan/agent/debug request against a project directory (or a
running file server), and manages provider selection.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from codearchitect import __version__
from codearchitect.config.settings import load_settings, open_config
from codearchitect.core.ai.dispatcher import StreamingDispatcher
from codearchitect.core.ai.registry import ProviderRegistry
from codearchitect.core.errors import CodeArchitectError
from codearchitect.core.orchestrator import Orchestrator
from codearchitect.core.session import ChatMode, Session
from codearchitect.services.file_service import LocalWorkspace
from codearchitect.services.workspace_client import WorkspaceAPIClient
from codearchitect.utils.colors import ACCENT, BOLD, ERROR, HIGHLIGHT, MUTED, RESET, SUCCESS
from codearchitect.utils.path_utils import resolve_base_dir

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# =====================================================================
#  MODE COMMANDS
# =====================================================================

async def _build_session(workspace, active_file: Optional[str], model: Optional[str]) -> Session:
    """Session seeded from the workspace files, or the starter project when empty."""
    snapshot = await workspace.get_workspace_context()
    files = {
        path: info.get("content") or ""
        for path, info in (snapshot.get("files") or {}).items()
    }
    if not files:
        session = Session.with_starter_project(selected_model=model)
    else:
        session = Session(files=files, selected_model=model)
    if active_file:
        session.set_active_file(active_file)
    return session


async def _run_mode(args, mode: ChatMode) -> int:
    config = open_config(args.config)
    settings = load_settings(config)
    registry = ProviderRegistry(config)
    dispatcher = StreamingDispatcher(registry)

    if args.server:
        workspace = WorkspaceAPIClient(settings.workspace_url)
        if args.dir and not await workspace.set_workspace(args.dir):
            print(f"{ERROR}❌ File server could not open {args.dir}{RESET}")
            return 1
    else:
        base_dir = resolve_base_dir(args.dir, settings.default_dir)
        if not base_dir.is_dir():
            print(f"{ERROR}❌ Error: Directory not found: {base_dir}{RESET}")
            return 1
        workspace = LocalWorkspace(base_dir)

    active = registry.get_active_provider()
    model = args.model or (active.models[0].id if active and active.models else None)
    try:
        session = await _build_session(workspace, args.file, model)
    except CodeArchitectError as e:
        print(f"{ERROR}❌ {e}{RESET}")
        return 1

    orchestrator = Orchestrator(
        session, dispatcher, workspace=workspace, plan_pacing=settings.plan_pacing
    )
    before = len(session.messages)
    await orchestrator.orchestrate(args.request, mode)

    for line in session.status_log:
        colour = ERROR if line.startswith("ERR:") else MUTED
        print(f"{colour}• {line}{RESET}")
    print()
    for message in session.messages[before:]:
        if message.role == "assistant":
            print(message.content)

    if mode == ChatMode.PLAN and session.active_file.startswith("PLAN_"):
        print(f"\n{ACCENT}Plan file:{RESET} {session.active_file}")
    return 1 if any(line.startswith("ERR:") for line in session.status_log) else 0


# =====================================================================
#  PROVIDER COMMANDS
# =====================================================================

def cmd_providers(args) -> int:
    config = open_config(args.config)
    registry = ProviderRegistry(config)

    if args.action == "list":
        for provider in registry.get_available_providers():
            marker = f"{HIGHLIGHT}●{RESET}" if provider.enabled else " "
            key = "key set" if provider.api_key else "no key"
            print(f"{marker} {BOLD}{provider.name}{RESET}  {MUTED}{provider.base_url} ({key}){RESET}")
        return 0

    if args.action == "use":
        if not args.name:
            print(f"{ERROR}❌ Provider name required{RESET}")
            return 1
        try:
            registry.set_active_provider(args.name)
        except ValueError as e:
            print(f"{ERROR}❌ {e}{RESET}")
            return 1
        print(f"{SUCCESS}✅ Active provider: {args.name}{RESET}")
        return 0

    if args.action == "models":
        active = registry.get_active_provider()
        if active is None:
            print(f"{ERROR}❌ No active provider{RESET}")
            return 1
        print(f"{ACCENT}{active.name} models:{RESET}")
        for model in registry.get_available_models():
            details = ", ".join(
                part for part in (
                    model.size,
                    f"{model.context_length} ctx" if model.context_length else None,
                ) if part
            )
            print(f"  {model.id}  {MUTED}{model.name}{' (' + details + ')' if details else ''}{RESET}")
        return 0

    if args.action == "configure":
        if not args.name:
            print(f"{ERROR}❌ Provider name required{RESET}")
            return 1
        changes = {}
        if args.api_key is not None:
            changes["api_key"] = args.api_key
        if args.base_url is not None:
            changes["base_url"] = args.base_url
        try:
            registry.update_provider(args.name, **changes)
        except ValueError as e:
            print(f"{ERROR}❌ {e}{RESET}")
            return 1
        print(f"{SUCCESS}✅ Updated {args.name}{RESET}")
        return 0

    return 1


async def cmd_check(args) -> int:
    config = open_config(args.config)
    settings = load_settings(config)
    dispatcher = StreamingDispatcher(ProviderRegistry(config))

    status = 0
    try:
        await dispatcher.check_provider(args.provider)
        print(f"{SUCCESS}✅ Provider {args.provider or 'active'} is reachable{RESET}")
    except (CodeArchitectError, ValueError) as e:
        print(f"{ERROR}❌ {e}{RESET}")
        status = 1

    if args.server:
        if await WorkspaceAPIClient(settings.workspace_url).check_health():
            print(f"{SUCCESS}✅ File server healthy at {settings.workspace_url}{RESET}")
        else:
            print(f"{ERROR}❌ File server not reachable at {settings.workspace_url}{RESET}")
            status = 1
    return status


# =====================================================================
#  CLI ENTRY WITH SUBCOMMANDS
# =====================================================================

def _create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="codearchitect",
        description="Code Architect: AI coding assistant with multi-provider streaming",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  codearchitect ask "How is routing set up?"
  codearchitect plan "Add a dark mode toggle" --dir ./site
  codearchitect agent "Create a contact form" --file index.html
  codearchitect providers use OpenAI
  codearchitect check
        """
    )

    parser.add_argument("--version", action="version", version=f"codearchitect {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=str, help="Path to config.json")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for mode in ChatMode:
        mode_parser = subparsers.add_parser(mode.value, help=f"Run a request in {mode.value} mode")
        mode_parser.add_argument("request", help="What you want done")
        mode_parser.add_argument("--dir", type=str, help="Project directory (default: config or cwd)")
        mode_parser.add_argument("--file", type=str, help="Active file")
        mode_parser.add_argument("--model", type=str, help="Model id override")
        mode_parser.add_argument(
            "--server", action="store_true", help="Use the file server instead of the local directory"
        )

    parser_providers = subparsers.add_parser("providers", help="List or select AI providers")
    parser_providers.add_argument("action", choices=["list", "use", "models", "configure"])
    parser_providers.add_argument("name", nargs="?", help="Provider name")
    parser_providers.add_argument("--api-key", type=str, help="API key (configure)")
    parser_providers.add_argument("--base-url", type=str, help="Base URL (configure)")

    parser_check = subparsers.add_parser("check", help="Health-check a provider")
    parser_check.add_argument("--provider", type=str, help="Provider name (default: active)")
    parser_check.add_argument("--server", action="store_true", help="Also check the file server")

    return parser


def main(argv=None):
    """Main entry point with subcommand routing."""
    parser = _create_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command in {m.value for m in ChatMode}:
        return asyncio.run(_run_mode(args, ChatMode(args.command)))
    elif args.command == "providers":
        return cmd_providers(args)
    elif args.command == "check":
        return asyncio.run(cmd_check(args))
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)

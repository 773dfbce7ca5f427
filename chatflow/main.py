"""ChatFlow command-line entry point.

Usage:
    chatflow new chats/intro.flow --title "Intro"
    chatflow show chats/intro.flow
    chatflow key set            # prompts for the key
    chatflow key check
    chatflow key validate --endpoint https://api.anthropic.com/v1/messages
    chatflow ls chats
    chatflow rm chats/old.flow
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys

from chatflow import commands
from chatflow.config import settings
from chatflow.errors import ChatFlowError
from chatflow.flow import FlowStore

logger = logging.getLogger(__name__)


def _mask(secret: str) -> str:
    if len(secret) <= 8:
        return "*" * len(secret)
    return f"{secret[:4]}...{secret[-4:]}"


def _cmd_new(args: argparse.Namespace) -> None:
    conversation = commands.create_new_conversation()
    if args.title:
        conversation.title = args.title
    flow_file = FlowStore.get().new_flow_file(conversation)
    commands.save_flow_file(args.path, flow_file)
    print(f"Created {args.path} ({conversation.id})")


def _cmd_show(args: argparse.Namespace) -> None:
    flow_file = commands.load_flow_file(args.path)
    conversation = flow_file.conversation
    print(f"{conversation.title} [{conversation.id}]")
    print(f"  version:  {flow_file.version}")
    print(f"  messages: {len(conversation.messages)}")
    if conversation.settings:
        print(f"  model:    {conversation.settings.model}")
    for message in conversation.messages:
        preview = message.content.replace("\n", " ")[:60]
        print(f"  - {message.sender}: {preview}")


def _cmd_key(args: argparse.Namespace) -> None:
    action = args.action
    if action == "set":
        value = args.value or getpass.getpass("API key: ")
        commands.save_api_key(value.strip())
        print("API key saved.")
    elif action == "get":
        print(_mask(commands.get_api_key()))
    elif action == "check":
        print("present" if commands.has_api_key() else "absent")
    elif action == "delete":
        commands.delete_api_key()
        print("API key deleted.")
    elif action == "validate":
        api_key = commands.get_api_key()
        asyncio.run(commands.validate_api_connection(api_key, args.endpoint))
        print("API key is valid.")


def _cmd_ls(args: argparse.Namespace) -> None:
    for name in commands.read_directory(args.path):
        print(name)


def _cmd_rm(args: argparse.Namespace) -> None:
    commands.remove_file(args.path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chatflow", description="ChatFlow flow files and API key")
    sub = parser.add_subparsers(dest="command", required=True)

    p_new = sub.add_parser("new", help="Create a new flow file")
    p_new.add_argument("path")
    p_new.add_argument("--title", help="Conversation title")
    p_new.set_defaults(func=_cmd_new)

    p_show = sub.add_parser("show", help="Summarize a flow file")
    p_show.add_argument("path")
    p_show.set_defaults(func=_cmd_show)

    p_key = sub.add_parser("key", help="Manage the stored API key")
    p_key.add_argument("action", choices=["set", "get", "check", "delete", "validate"])
    p_key.add_argument("value", nargs="?", help="Key value for 'set' (prompted if omitted)")
    p_key.add_argument("--endpoint", help="Endpoint for 'validate' (default: CHATFLOW_API_ENDPOINT)")
    p_key.set_defaults(func=_cmd_key)

    p_ls = sub.add_parser("ls", help="List a directory")
    p_ls.add_argument("path")
    p_ls.set_defaults(func=_cmd_ls)

    p_rm = sub.add_parser("rm", help="Remove a file")
    p_rm.add_argument("path")
    p_rm.set_defaults(func=_cmd_rm)

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, settings.log_level.upper()),
    )
    args = build_parser().parse_args(argv)
    logger.debug("Running command: %s", args.command)
    try:
        args.func(args)
    except ChatFlowError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

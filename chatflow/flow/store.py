"""FlowStore — read and write .flow files on the local filesystem."""

from __future__ import annotations

import logging
import os
import stat
import uuid
from pathlib import Path

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from chatflow.config import settings
from chatflow.errors import IoError, ParseError, SerializeError
from chatflow.flow.models import FlowConversation, FlowFile, make_conversation

logger = logging.getLogger(__name__)


class FlowStore:
    """Round-trips a FlowFile to a caller-supplied path.

    Singleton accessed via ``FlowStore.get()``.  Pass an explicit *version*
    or *default_title* to build an isolated instance in tests.

    All methods are synchronous. A flow file is a single small JSON
    document, read and written in one call.
    """

    _instance: FlowStore | None = None

    def __init__(self, version: str | None = None, default_title: str | None = None) -> None:
        self._version = version or settings.flow_file_version
        self._default_title = default_title or settings.default_conversation_title

    @classmethod
    def get(cls) -> FlowStore:
        """Return the shared FlowStore instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def _reset(cls) -> None:
        """Clear the singleton (for tests)."""
        cls._instance = None

    @property
    def version(self) -> str:
        """Format version written into new flow files."""
        return self._version

    # -- Construction ----------------------------------------------------------

    def new_conversation(self) -> FlowConversation:
        """Create an empty, unsaved conversation with a fresh id."""
        return make_conversation(self._default_title)

    def new_flow_file(self, conversation: FlowConversation | None = None) -> FlowFile:
        """Wrap *conversation* (or a new one) in a FlowFile at the current version."""
        if conversation is None:
            conversation = self.new_conversation()
        return FlowFile(
            version=self._version,
            conversation=conversation,
            checksum=None,
        )

    # -- File operations -------------------------------------------------------

    def read(self, path: str | Path) -> FlowFile:
        """Read and parse a flow file.

        Raises ``IoError`` if the file cannot be read and ``ParseError`` if
        its content is not valid JSON or does not match the schema.
        """
        target = Path(path)
        try:
            content = target.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Flow read failed: %s (%s)", target, exc)
            msg = f"Failed to read file: {exc}"
            raise IoError(msg) from exc

        try:
            flow_file = FlowFile.model_validate_json(content)
        except ValidationError as exc:
            logger.warning("Flow parse failed: %s (%d error(s))", target, exc.error_count())
            msg = f"Failed to parse flow file: {exc}"
            raise ParseError(msg) from exc

        logger.debug(
            "Read flow file %s (version=%s, %d message(s))",
            target,
            flow_file.version,
            len(flow_file.conversation.messages),
        )
        return flow_file

    def write(self, path: str | Path, flow_file: FlowFile) -> None:
        """Serialize *flow_file* as indented JSON and replace *path* with it.

        The content goes to a temporary sibling first and is renamed over
        the target, so a failed write leaves the previous file untouched.
        A symlinked *path* is followed, so the link survives and its target
        gets the new content. New files get the process umask; an existing
        file keeps its permission bits.
        Raises ``SerializeError`` if encoding fails and ``IoError`` if the
        file cannot be written.
        """
        target = Path(path).resolve()
        try:
            content = flow_file.model_dump_json(indent=2)
        except PydanticSerializationError as exc:
            msg = f"Failed to serialize flow file: {exc}"
            raise SerializeError(msg) from exc

        tmp = target.with_name(f".{target.name}.{uuid.uuid4().hex}.tmp")
        created = False
        try:
            mode = _existing_mode(target)
            fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
            created = True
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            if mode is not None:
                os.chmod(tmp, mode)
            os.replace(tmp, target)
        except OSError as exc:
            if created:
                tmp.unlink(missing_ok=True)
            logger.warning("Flow write failed: %s (%s)", target, exc)
            msg = f"Failed to write file: {exc}"
            raise IoError(msg) from exc

        logger.info(
            "Saved flow file %s (%d message(s), %d bytes)",
            target,
            len(flow_file.conversation.messages),
            len(content),
        )


def _existing_mode(target: Path) -> int | None:
    """Permission bits of the file being replaced, or None if there is none."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        return None

import logging

from schemagen.models import MessageKind, MessagePair, ProcessorStats, StructInfo

logger = logging.getLogger(__name__)

_SUFFIX_KINDS = (
    ("Request", MessageKind.REQUEST),
    ("Response", MessageKind.RESPONSE),
)


def split_message_name(name: str) -> tuple[str, MessageKind]:
    """Split a message type name into its base name and kind.

    ``ResetRequest`` -> (``Reset``, request); a name without a Request/Response
    suffix, e.g. ``NotifyPeriodicEventStream``, is a standalone message.
    """
    for suffix, kind in _SUFFIX_KINDS:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)], kind
    return name, MessageKind.STANDALONE


class MessagePairer:
    """Groups structs under their base name as schema files are read."""

    def __init__(self) -> None:
        self._pairs: dict[str, MessagePair] = {}
        self.struct_count = 0

    def add(self, struct: StructInfo) -> MessagePair:
        base_name, kind = split_message_name(struct.name)
        pair = self._pairs.get(base_name)
        if pair is None:
            pair = self._pairs[base_name] = MessagePair(base_name=base_name)
        replaced = pair.fill(kind, struct)
        if replaced is not None:
            logger.warning("Duplicate %s schema for %s; keeping the one read last", kind.value, base_name)
        self.struct_count += 1
        return pair

    @property
    def pairs(self) -> list[MessagePair]:
        return [self._pairs[name] for name in sorted(self._pairs)]

    def get(self, base_name: str) -> MessagePair | None:
        return self._pairs.get(base_name)

    def complete(self) -> list[MessagePair]:
        return [pair for pair in self.pairs if pair.is_complete]

    def incomplete(self) -> list[MessagePair]:
        return [pair for pair in self.pairs if not pair.is_complete]

    def stats(self) -> ProcessorStats:
        complete = self.complete()
        return ProcessorStats(
            schema_files=self.struct_count,
            total_pairs=len(self._pairs),
            complete_pairs=len(complete),
            incomplete_pairs=len(self._pairs) - len(complete),
            standalone_messages=sum(1 for pair in complete if pair.is_standalone),
        )

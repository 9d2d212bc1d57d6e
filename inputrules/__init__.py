"""Text-descriptor input mappings evaluated once per frame."""

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from inputrules.api.action_dispatch import ActionSink
    from inputrules.api.mapping import MappingRecord
    from inputrules.runtime.host import InputRuleHost


def create_host(
    records: "Iterable[MappingRecord]" = (),
    *,
    sink: "ActionSink",
    **options: Any,
) -> "InputRuleHost":
    """Create an input rule host with runtime-owned composition."""
    from inputrules.runtime.host import InputRuleHost

    return InputRuleHost(records, sink=sink, **options)


__all__ = ["create_host"]

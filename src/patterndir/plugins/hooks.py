"""Hook context and the item-preparation pipeline.

This module provides the components that turn validated
:class:`~patterndir.models.RawPattern` records into what the caller sees:

* :class:`HookContext` -- the per-item context handed to every hook.
* :class:`PreparePipeline` -- projects each record onto the exposed schema,
  then runs every registered hook over it in registration order.

Hooks are plain callables ``(item, ctx) -> item``. Each hook receives the
output of the previous one and may replace the item entirely, even with a
scalar; the pipeline does not enforce shape preservation. The pipeline only
reads records, so it behaves identically whether they came from a fresh fetch
or from the cache.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence

from patterndir.models import DirectoryRequest, RawPattern
from patterndir.prepare import prepare_item


@dataclass(frozen=True)
class HookContext:
    """Context passed alongside each item to the hook chain.

    Attributes:
        request: The inbound request being answered.
        raw: The raw record the item was prepared from, extra fields included.
    """

    request: DirectoryRequest
    raw: RawPattern


PrepareHook = Callable[[Any, HookContext], Any]
"""A transform applied to each prepared item before it is returned."""


class PreparePipeline:
    """Applies the item projection and registered hooks to directory records.

    Args:
        hooks: Ordered hooks. They run in the order given here for every item.
    """

    def __init__(self, hooks: Optional[Iterable[PrepareHook]] = None) -> None:
        self._hooks: list[PrepareHook] = list(hooks or [])

    @property
    def hooks(self) -> tuple[PrepareHook, ...]:
        return tuple(self._hooks)

    def add_hook(self, hook: PrepareHook) -> None:
        """Append *hook* to the end of the chain."""
        self._hooks.append(hook)

    def apply(self, records: Sequence[RawPattern], request: DirectoryRequest) -> list[Any]:
        """Prepare every record in *records* for *request*.

        Returns:
            One entry per record, in input order.
        """
        return [self.prepare(raw, request) for raw in records]

    def prepare(self, raw: RawPattern, request: DirectoryRequest) -> Any:
        """Prepare a single record: projection, hooks, then field selection."""
        item: Any = prepare_item(raw)
        ctx = HookContext(request=request, raw=raw)
        for hook in self._hooks:
            item = hook(item, ctx)
        if request.fields and isinstance(item, dict):
            item = {k: v for k, v in item.items() if k in request.fields}
        return item

"""State machine behind the virtual try-on panel.

The panel walks a single uploaded outfit photo through
``EMPTY -> IDENTIFYING -> ITEMS_READY`` and hands the chosen items to an
external ``on_apply_swap`` callback; it never performs the swap itself.
Rendering is left to the host UI, which reads the public properties.

Each upload allocates a display handle (an object URL in a browser). The
handle is released exactly once: on failure, on reset, on a newer upload,
or on :meth:`SwapPanel.close`.
"""

from __future__ import annotations

import asyncio
import enum
import inspect
import itertools
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Sequence, Union

logger = logging.getLogger(__name__)

NO_ITEMS_MESSAGE = "Could not identify any clothing items in the image. Please try another one."
ANALYSIS_FAILED_MESSAGE = "An error occurred while analyzing the image."

IdentifyCallable = Callable[[Any], Union[Sequence[str], Awaitable[Sequence[str]]]]
ApplySwapCallable = Callable[[Any, List[str]], None]


class PanelState(str, enum.Enum):
    EMPTY = "empty"
    IDENTIFYING = "identifying"
    ITEMS_READY = "items_ready"
    APPLYING = "applying"
    FAILED = "failed"


class DisplayHandleRegistry(Protocol):
    def create(self, file: Any) -> str: ...

    def revoke(self, handle: str) -> None: ...


class ObjectUrlRegistry:
    """In-memory stand-in for ``URL.createObjectURL`` / ``revokeObjectURL``."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self.active: Dict[str, Any] = {}
        self.revoked: List[str] = []

    def create(self, file: Any) -> str:
        handle = f"blob:pixshop/{next(self._counter)}"
        self.active[handle] = file
        return handle

    def revoke(self, handle: str) -> None:
        if handle not in self.active:
            raise KeyError(f"Display handle {handle!r} is not active.")
        del self.active[handle]
        self.revoked.append(handle)


class SwapPanel:
    def __init__(
        self,
        *,
        identify: IdentifyCallable,
        on_apply_swap: ApplySwapCallable,
        registry: Optional[DisplayHandleRegistry] = None,
    ) -> None:
        self._identify = identify
        self._on_apply_swap = on_apply_swap
        self._registry: DisplayHandleRegistry = registry or ObjectUrlRegistry()

        self._phase = PanelState.EMPTY
        self._upload_id = 0
        self.source_file: Any = None
        self.display_handle: Optional[str] = None
        self.identified_items: List[str] = []
        self.selected_items: List[str] = []
        self.error: Optional[str] = None
        self.is_loading = False

    # -- derived view state ------------------------------------------------

    @property
    def state(self) -> PanelState:
        if self._phase is PanelState.ITEMS_READY and self.is_loading:
            return PanelState.APPLYING
        return self._phase

    @property
    def shows_uploader(self) -> bool:
        return self._phase in (PanelState.EMPTY, PanelState.FAILED)

    @property
    def can_apply(self) -> bool:
        return (
            self._phase is PanelState.ITEMS_READY
            and bool(self.selected_items)
            and not self.is_loading
        )

    @property
    def apply_label(self) -> str:
        count = len(self.selected_items)
        noun = "Item" if count == 1 else "Items"
        return f"Apply Swap ({count} {noun})"

    # -- transitions -------------------------------------------------------

    def _release_handle(self) -> None:
        if self.display_handle is not None:
            handle, self.display_handle = self.display_handle, None
            self._registry.revoke(handle)

    def _clear(self) -> None:
        self._release_handle()
        self.source_file = None
        self.identified_items = []
        self.selected_items = []

    async def _run_identify(self, file: Any) -> Sequence[str]:
        if inspect.iscoroutinefunction(self._identify):
            return await self._identify(file)
        result = await asyncio.to_thread(self._identify, file)
        # Lambdas and objects with ``async def __call__`` hand back an awaitable.
        if inspect.isawaitable(result):
            result = await result
        return result

    async def select_file(self, file: Any) -> None:
        """Start identification for a newly uploaded outfit photo."""

        if file is None:
            return

        self._upload_id += 1
        upload_id = self._upload_id
        self._clear()
        self.error = None
        self.source_file = file
        self.display_handle = self._registry.create(file)
        self._phase = PanelState.IDENTIFYING

        try:
            items = list(await self._run_identify(file))
        except Exception:  # noqa: BLE001 - surfaced to the user as a panel error.
            if upload_id != self._upload_id:
                return
            logger.exception("Identification failed")
            self._fail(ANALYSIS_FAILED_MESSAGE)
            return

        if upload_id != self._upload_id:
            logger.debug("Ignoring identification result for superseded upload %d", upload_id)
            return

        if items:
            self.identified_items = items
            self.selected_items = []
            self._phase = PanelState.ITEMS_READY
        else:
            self._fail(NO_ITEMS_MESSAGE)

    def _fail(self, message: str) -> None:
        self._clear()
        self.error = message
        self._phase = PanelState.FAILED

    def toggle_item(self, label: str) -> None:
        if self._phase is not PanelState.ITEMS_READY or label not in self.identified_items:
            return
        if label in self.selected_items:
            self.selected_items = [item for item in self.selected_items if item != label]
        else:
            self.selected_items = [*self.selected_items, label]

    def apply(self) -> bool:
        """Hand the source file and selected items to ``on_apply_swap``."""

        if not self.can_apply:
            return False
        self._on_apply_swap(self.source_file, list(self.selected_items))
        return True

    def reset(self) -> None:
        self._upload_id += 1
        self._clear()
        self.error = None
        self._phase = PanelState.EMPTY

    def close(self) -> None:
        self._upload_id += 1
        self._clear()
        self._phase = PanelState.EMPTY

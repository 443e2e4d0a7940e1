"""Output type registry — maps wire discriminants to output classes.

A registry is an immutable value. Supporting a new output kind means building
a new registry with :meth:`OutputTypeRegistry.register`; existing variants and
registries are untouched.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from avm_ledger.avm.outputs import NFTTransferOutput, Output, SECPTransferOutput
from avm_ledger.errors.codec_errors import UnknownOutputType

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from avm_ledger.config.settings import CodecConfig

logger = logging.getLogger(__name__)


class OutputTypeRegistry:
    """Read-only lookup table of output discriminant → concrete Output class.

    Each registered class must be constructible with no arguments and expose
    its discriminant as ``OUTPUT_ID``.
    """

    def __init__(self, entries: Mapping[int, type[Output]] | None = None) -> None:
        entries = dict(entries or {})
        for output_id, output_cls in entries.items():
            if getattr(output_cls, "OUTPUT_ID", None) != output_id:
                msg = f"{output_cls.__name__} does not report output type id {output_id}"
                raise ValueError(msg)
        self._entries: Mapping[int, type[Output]] = MappingProxyType(entries)

    @property
    def output_ids(self) -> list[int]:
        """Registered discriminants, ascending."""
        return sorted(self._entries)

    def __contains__(self, output_id: object) -> bool:
        return output_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(self.output_ids)

    def register(self, output_cls: type[Output]) -> OutputTypeRegistry:
        """Return a new registry that also decodes *output_cls*.

        Raises:
            ValueError: If its discriminant is already registered.
        """
        output_id = int(output_cls.OUTPUT_ID)  # type: ignore[attr-defined]
        if output_id in self._entries:
            existing = self._entries[output_id].__name__
            msg = f"Output type id {output_id} already registered to {existing}"
            raise ValueError(msg)
        return OutputTypeRegistry({**self._entries, output_id: output_cls})

    def lookup(self, output_id: int) -> type[Output]:
        """Return the class registered for *output_id*.

        Raises:
            UnknownOutputType: If nothing is registered for *output_id*.
        """
        try:
            return self._entries[output_id]
        except KeyError:
            logger.debug("No output class registered for id %d", output_id)
            raise UnknownOutputType(output_id) from None

    def dispatch(
        self,
        output_id: int,
        data: bytes | bytearray | memoryview,
        offset: int = 0,
        *,
        config: CodecConfig | None = None,
    ) -> tuple[Output, int]:
        """Decode the output of kind *output_id* found at *offset*.

        Returns:
            Tuple of (decoded output, offset just past it).

        Raises:
            UnknownOutputType: If *output_id* is not registered.
            MalformedInput: If the buffer is truncated.
        """
        output_cls = self.lookup(output_id)
        output = output_cls()
        end = output.deserialize(data, offset, config=config)
        logger.debug(
            "Decoded %s (id %d) from %d bytes at offset %d",
            output_cls.__name__,
            output_id,
            end - offset,
            offset,
        )
        return output, end


DEFAULT_OUTPUT_REGISTRY = OutputTypeRegistry(
    {
        SECPTransferOutput.OUTPUT_ID: SECPTransferOutput,
        NFTTransferOutput.OUTPUT_ID: NFTTransferOutput,
    }
)


def select_output_class(
    output_id: int,
    data: bytes | bytearray | memoryview,
    offset: int = 0,
    *,
    registry: OutputTypeRegistry | None = None,
    config: CodecConfig | None = None,
) -> Output:
    """Decode and return the output of kind *output_id* found at *offset*.

    Uses :data:`DEFAULT_OUTPUT_REGISTRY` unless *registry* is given.
    """
    output, _ = (registry if registry is not None else DEFAULT_OUTPUT_REGISTRY).dispatch(
        output_id, data, offset, config=config
    )
    return output

"""AVM outputs — wire codec, variant hierarchy, type dispatch, spend checks."""

from avm_ledger.avm.constants import ADDRESS_LEN, ASSET_ID_LEN, OutputID
from avm_ledger.avm.outputs import (
    AmountOutput,
    NFTOutputBase,
    NFTTransferOutput,
    Output,
    SECPTransferOutput,
    sort_outputs,
)
from avm_ledger.avm.registry import (
    DEFAULT_OUTPUT_REGISTRY,
    OutputTypeRegistry,
    select_output_class,
)
from avm_ledger.avm.transferable import TransferableOutput, sort_transferable_outputs

__all__ = [
    "ADDRESS_LEN",
    "ASSET_ID_LEN",
    "DEFAULT_OUTPUT_REGISTRY",
    "AmountOutput",
    "NFTOutputBase",
    "NFTTransferOutput",
    "Output",
    "OutputID",
    "OutputTypeRegistry",
    "SECPTransferOutput",
    "TransferableOutput",
    "select_output_class",
    "sort_outputs",
    "sort_transferable_outputs",
]

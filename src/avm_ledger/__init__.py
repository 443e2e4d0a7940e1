"""py-avm — output records, wire codec and spend authorization for AVM-style ledgers."""

__version__ = "0.1.0"

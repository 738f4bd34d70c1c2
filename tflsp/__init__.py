"""Building blocks for a Terraform language server: HCL lookups, semantic tokens and LSP conversions."""

__version__ = "0.1.0"
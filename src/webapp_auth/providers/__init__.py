"""Cloud provider implementations (Azure only)."""

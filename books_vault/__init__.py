"""Books Vault: a personal book catalog."""

"""Application layer – policy engine and its context cache."""

"""Application layer: session commands, queries and the coordinator."""

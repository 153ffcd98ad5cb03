"""Table decoders, discovered by the reader registry."""

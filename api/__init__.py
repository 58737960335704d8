"""HTTP surface of the interview chat gateway."""

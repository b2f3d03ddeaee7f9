"""HTTP types — the request and response values handlers see."""

"""Server side of the mux — ASGI request pipeline, response sending, dev server."""

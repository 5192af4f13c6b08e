"""API middleware: session authentication dependencies and the request gate."""

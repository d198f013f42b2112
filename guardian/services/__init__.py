"""Request handlers, one router per capability."""

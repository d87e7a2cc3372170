"""Bridge between a smart-home hub and an HTTP/JSON floodlight."""

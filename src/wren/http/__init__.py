"""Request value bags and the response-writer boundary."""

"""Services — shell orchestration of store IO around core lifecycle rules."""

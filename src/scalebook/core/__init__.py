"""Core plumbing: configuration, exceptions, storage backends, logging."""

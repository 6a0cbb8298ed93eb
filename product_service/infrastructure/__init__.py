"""Infrastructure layer: configuration, database, logging, remote clients."""

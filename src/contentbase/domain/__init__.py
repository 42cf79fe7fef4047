"""Domain layer: entities, services and errors of the collection engine."""

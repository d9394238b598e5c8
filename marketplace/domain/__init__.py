"""Domain layer: entities, geospatial math and order lifecycle rules."""

"""In-memory product inventory: models, errors and the product store."""

"""Card data: models, pool loading, remote lookups and caches."""

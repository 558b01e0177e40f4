"""Version 1 of the Creature Catalog API."""

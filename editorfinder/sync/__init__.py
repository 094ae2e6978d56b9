"""Editor sync from external sources (TMDb, Emmy reference data)."""

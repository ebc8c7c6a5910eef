"""Provider feed clients."""

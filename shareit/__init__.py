"""ShareIt: item-sharing marketplace backend."""

"""Journal module: recording trades and checking them against history."""

"""Social feed backend: accounts, posts, comments and reactions."""

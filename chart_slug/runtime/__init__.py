"""Runtime components: builder and serialization."""

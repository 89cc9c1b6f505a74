"""Release pipeline services — discovery, loading, grouping, synthesis."""

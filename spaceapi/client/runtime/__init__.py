"""Runtime: HTTP execution, paging and chunking."""

"""Row selection: filter dimensions, predicates and dropdown options."""

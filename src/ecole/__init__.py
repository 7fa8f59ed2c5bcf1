"""School management back end: students, parents, imports and analytics."""

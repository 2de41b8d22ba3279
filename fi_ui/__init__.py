"""Console front-end for fs-inventory."""

"""Convert H5P interactive content packages into paginated documents."""

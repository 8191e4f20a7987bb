"""Task graph host: variants, tasks, scheduling and build descriptions."""

"""Bot commands embedded in comment text."""

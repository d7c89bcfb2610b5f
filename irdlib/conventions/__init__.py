"""Market conventions: day counts, calendars, indices and leg conventions."""

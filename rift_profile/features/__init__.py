"""Feature slices: profiles, matches, assets."""

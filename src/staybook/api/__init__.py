"""HTTP layer for the Staybook reservation API."""

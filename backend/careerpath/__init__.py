"""CareerPath backend."""

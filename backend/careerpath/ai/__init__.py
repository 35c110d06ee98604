"""Language model access for roadmap drafting."""

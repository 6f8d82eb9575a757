"""HTTP API for the storybook generator."""

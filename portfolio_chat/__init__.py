"""AI chat endpoint for the Mila Arty portfolio site."""

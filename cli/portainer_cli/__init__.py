"""Command line and tool dispatch for the Portainer client."""

"""Commands run by the identity user import cli."""

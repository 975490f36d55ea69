"""Tower defense simulation, grid pathfinding, play session and main menu model."""

__version__ = "0.1.0"

__all__ = ["menu", "td_models", "td_pathfinding", "td_session", "td_world"]
from .player import Player, TeamSummary

__all__ = ["Player", "TeamSummary"]

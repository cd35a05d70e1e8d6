"""
Exceptions raised by the prediction engine.
"""


class InsufficientHistory(Exception):
    """
    Raised when a team has no finished matches to derive form from.
    """

    def __init__(self, team_id: int):
        super().__init__(f"Team {team_id} has no finished matches to predict from")
        self.team_id = team_id

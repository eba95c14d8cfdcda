"""Exceptions for use in Gambit Competition"""

# Gambit Competition
# Copyright (C) 2025  Gambit Competition developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


# ========== Base Application Exception ==========


class CompetitionException(Exception):
    """Base exception for all Gambit Competition errors.

    All custom exceptions in the library inherit from this class.
    This enables catching all library-specific errors with a single except clause.
    """

    pass


# ========== Player Count Exceptions ==========


class PlayerCountException(CompetitionException):
    """Raised when there are not enough players for the requested operation."""

    def __init__(self, context: str, expected: int):
        self.context = context
        self.expected = expected
        super().__init__(f"Not enough players {context}: at least {expected} players required")


# ========== Parameter Exceptions ==========


class ParameterException(CompetitionException):
    """Raised when a competition option is invalid."""

    def __init__(self, requirement: str, parameter: str):
        self.requirement = requirement
        self.parameter = parameter
        super().__init__(f"Parameter '{parameter}' {requirement}")


class RoundCountException(ParameterException):
    """Raised when the requested number of rounds is too low."""

    def __init__(self, context: str, minimum: int):
        self.context = context
        self.minimum = minimum
        super().__init__(f"must be at least {minimum} {context}", "round count")


class PerformanceToSumException(ParameterException):
    """Raised when an elimination contest has no performance type to sum."""

    def __init__(self):
        super().__init__(
            "required to create competition (at least one performance type)",
            "performance types to sum",
        )


# ========== Runtime Exceptions ==========


class CompetitionRuntimeException(CompetitionException):
    """Raised when a structural operation is not allowed."""

    pass


# ========== Ranking Exceptions ==========


class RankingException(CompetitionException):
    """Raised when rankings cannot be computed or combined."""

    pass


# ========== Builder Exceptions ==========


class BuilderException(CompetitionException):
    """Base exception for blueprint declaration errors."""

    pass


class CompetitionTypeException(BuilderException):
    """Raised when an unknown competition type is requested."""

    def __init__(self, competition_type: str):
        self.competition_type = competition_type
        super().__init__(f"Unknown competition type: {competition_type!r}")


class BuilderOptionException(BuilderException):
    """Raised when a group declares an option its competition type does not know."""

    def __init__(self, option: str, competition_type: str):
        self.option = option
        self.competition_type = competition_type
        super().__init__(
            f"Option {option!r} is not supported by competition type {competition_type!r}"
        )

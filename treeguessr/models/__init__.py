"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .round import InputMode, LossReason, Round, RoundState, RoundView

__all__ = ['InputMode', 'LossReason', 'Round', 'RoundState', 'RoundView']

"""
Game Logger Module for Treeguessr

This module provides structured logging for user actions, server responses,
and round events. Every entry is a single JSON document so the log file can
be parsed line by line.
"""

import logging
import json
from collections import Counter
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path


class GameLogger:
    """
    Centralized logging system for the Treeguessr server.

    Features:
    - User action tracking with IP identification
    - Server response logging
    - Round event logging (wins, losses, new rounds)
    - JSON structured logs for easy parsing

    The console handler is attached immediately; the file handler is attached
    by init_app() once the application config is known.
    """

    def __init__(self, name: str = "treeguessr"):
        self.log_dir: Optional[Path] = None
        self.logger = self._setup_logger(name)

    def _setup_logger(self, name: str) -> logging.Logger:
        """Setup the main game logger with a console handler."""
        logger = logging.getLogger(name)
        logger.setLevel(logging.INFO)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        # Console handler for only important messages (WARNING and above)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(console_handler)

        return logger

    def init_app(self, app) -> None:
        """Attach the dated log file handler using the app's LOG_DIR and LOG_LEVEL."""
        self.log_dir = Path(app.config.get('LOG_DIR', 'logs'))
        self.log_dir.mkdir(parents=True, exist_ok=True)

        level = logging.getLevelName(str(app.config.get('LOG_LEVEL', 'INFO')).upper())
        if not isinstance(level, int):
            level = logging.INFO
        self.logger.setLevel(level)

        for handler in list(self.logger.handlers):
            if isinstance(handler, logging.FileHandler):
                self.logger.removeHandler(handler)
                handler.close()

        file_handler = logging.FileHandler(self._log_file(), encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        self.logger.addHandler(file_handler)

    def _log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _get_user_identity(self, request) -> Dict[str, str]:
        """Extract user identity information from request."""
        return {
            'user_ip': getattr(request, 'remote_addr', None) or 'unknown',
        }

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          user_info: Dict[str, str],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_user_action(self,
                        request,
                        action: str,
                        game_id: Optional[str] = None,
                        **kwargs):
        """
        Log user actions with full context.

        Args:
            request: Flask request object
            action: Type of action (e.g., 'new_game', 'guess_letter', 'guess_word')
            game_id: Game identifier if applicable
            **kwargs: Additional details to log
        """
        details = {
            'game_id': game_id,
            'endpoint': getattr(request, 'endpoint', None),
            'method': getattr(request, 'method', None),
            **kwargs
        }

        log_message = self._create_log_entry('USER_ACTION', action, self._get_user_identity(request), details)
        self.logger.info(log_message)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Dict[str, Any],
                            game_id: Optional[str] = None,
                            **kwargs):
        """
        Log server responses with full context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            game_id: Game identifier if applicable
            **kwargs: Additional details to log
        """
        details = {
            'game_id': game_id,
            'success': success,
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, self._get_user_identity(request), details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_game_event(self,
                       game_id: Optional[str],
                       event: str,
                       user_ip: Optional[str] = None,
                       **kwargs):
        """
        Log round events.

        Args:
            game_id: Game identifier
            event: Type of event (e.g., 'round_started', 'game_won', 'game_lost')
            user_ip: User's IP address, 'system' for server-initiated events
            **kwargs: Additional round details
        """
        details = {
            'game_id': game_id,
            **kwargs
        }

        log_message = self._create_log_entry('GAME_EVENT', event, {'user_ip': user_ip or 'system'}, details)
        self.logger.info(log_message)

    def log_error(self,
                  request,
                  error: Exception,
                  action: str,
                  game_id: Optional[str] = None):
        """Log errors with full context."""
        details = {
            'game_id': game_id,
            'error_type': type(error).__name__,
            'error_message': str(error),
        }

        log_message = self._create_log_entry('ERROR', action, self._get_user_identity(request), details)
        self.logger.error(log_message)

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Reduce round snapshots to their counters; the slots and answer are never logged."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = data.copy()
        if 'state' in sanitized and isinstance(sanitized['state'], dict):
            state = sanitized['state']
            sanitized['state'] = {
                'state': state.get('state'),
                'score': state.get('score'),
                'attempts_remaining': state.get('attempts_remaining'),
                'wrong_letters': state.get('wrong_letters'),
                'guessed_count': len(state.get('guessed_letters', [])),
                'answer_revealed': state.get('answer') is not None
            }

        return sanitized

    def get_log_stats(self) -> Dict[str, Any]:
        """Count today's log entries by event type."""
        if self.log_dir is None:
            return {'error': 'File logging not configured'}

        log_file = self._log_file()
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        event_counts = Counter()
        total_entries = 0
        with open(log_file, 'r', encoding='utf-8') as f:
            for line in f:
                parts = line.split(' | ', 2)
                if len(parts) < 3 or not parts[2].strip():
                    continue
                payload = parts[2]
                total_entries += 1
                try:
                    event_counts[json.loads(payload)['event_type']] += 1
                except (ValueError, KeyError, TypeError):
                    event_counts['PLAIN'] += 1

        return {
            'log_file': str(log_file),
            'file_size_kb': round(log_file.stat().st_size / 1024, 1),
            'total_entries': total_entries,
            'events': dict(event_counts)
        }


# Global logger instance
game_logger = GameLogger()

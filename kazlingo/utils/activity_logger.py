"""
Activity Logger Module for the KazLingo Server

This module provides structured logging for user actions, server responses,
progression events and errors.
"""

import logging
import json
import os
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

# Response fields that must never reach the log files
SENSITIVE_FIELDS = ('token', 'password')

# Puzzle fields holding answers, masked in logged responses
ANSWER_FIELDS = ('word', 'answer', 'proverb')


class ActivityLogger:
    """
    Centralized logging system for the KazLingo server.

    Features:
    - User action tracking with IP and authenticated user identification
    - Server response logging with secrets and answers masked
    - Game event logging (level advances, rounds won or lost)
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = logging.getLevelName(level.upper()) if isinstance(level, str) else level

        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the application logger with file and console handlers."""
        logger = logging.getLogger('kazlingo')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        log_file = self.log_dir / f"activity_log_{datetime.now().strftime('%Y-%m-%d')}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console only shows warnings and errors
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    @property
    def log_file(self) -> Path:
        return self.log_dir / f"activity_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _get_user_identity(self, request) -> Dict[str, Optional[str]]:
        """Extract user identity information from request."""
        user = getattr(request, 'user', None) or {}
        return {
            'user_ip': getattr(request, 'remote_addr', None) or 'unknown',
            'user_id': user.get('id'),
            'username': user.get('username')
        }

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          user_info: Dict[str, Optional[str]],
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

    def log_user_action(self, request, action: str, **kwargs):
        """
        Log user actions with full context.

        Args:
            request: Flask request object
            action: Type of action (e.g., 'get_current_level', 'submit_guess')
            **kwargs: Additional details to log
        """
        details = {
            'endpoint': request.endpoint,
            'method': request.method,
            'url': request.url,
            **kwargs
        }

        log_message = self._create_log_entry('USER_ACTION', action, self._get_user_identity(request), details)
        self.logger.info(log_message)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Any,
                            **kwargs):
        """
        Log server responses with full context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            **kwargs: Additional details to log
        """
        details = {
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, self._get_user_identity(request), details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_game_event(self, request, event: str, game: str, **kwargs):
        """
        Log game-specific events (level advances, rounds won or lost, etc.).

        Args:
            request: Flask request object
            event: Type of game event (e.g., 'level_advanced', 'round_lost')
            game: Game key
            **kwargs: Additional game details
        """
        details = {'game': game, **kwargs}
        log_message = self._create_log_entry('GAME_EVENT', event, self._get_user_identity(request), details)
        self.logger.info(log_message)

    def log_error(self, request, error: Exception, action: str, **kwargs):
        """
        Log errors with full context. The error text stays server-side.

        Args:
            request: Flask request object
            error: Exception that occurred
            action: Action that was being performed
        """
        details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            **kwargs
        }

        log_message = self._create_log_entry('ERROR', action, self._get_user_identity(request), details)
        self.logger.error(log_message)

    def _sanitize_response_data(self, data: Any) -> Any:
        """Remove secrets and mask puzzle answers in logged responses."""
        if isinstance(data, list):
            return {'items': len(data)}

        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = {}
        for key, value in data.items():
            if key in SENSITIVE_FIELDS:
                continue
            if key in ANSWER_FIELDS and value is not None:
                sanitized[key] = '***'
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize_response_data(value)
            else:
                sanitized[key] = value

        return sanitized

    def get_log_stats(self) -> Dict[str, Any]:
        """Get statistics about today's logged events (used by the health check)."""
        log_file = self.log_file
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        stats = {
            'log_file': str(log_file),
            'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
            'total_entries': 0,
            'user_actions': 0,
            'server_responses': 0,
            'game_events': 0,
            'errors': 0
        }

        with open(log_file, 'r', encoding='utf-8') as f:
            for line in f:
                if not line.strip():
                    continue
                stats['total_entries'] += 1
                if 'USER_ACTION' in line:
                    stats['user_actions'] += 1
                elif 'SERVER_RESPONSE' in line:
                    stats['server_responses'] += 1
                elif 'GAME_EVENT' in line:
                    stats['game_events'] += 1
                elif '"ERROR"' in line:
                    stats['errors'] += 1

        return stats


# Global logger instance
activity_logger = ActivityLogger(os.getenv('LOG_DIR', 'logs'), os.getenv('LOG_LEVEL', 'INFO'))

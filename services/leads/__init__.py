"""Подмодуль сервисов, связанных с лидами."""

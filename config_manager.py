"""
Configuration Management for ARB Translation Assistant

Handles loading and saving of user configuration.
"""

import os
import json
import logging

from constants import DEFAULT_FILE_PRIORITY, DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages application configuration"""

    def __init__(self, config_file=None):
        if config_file is None:
            config_file = os.path.join(os.path.expanduser("~"), ".arb_translation_assistant.json")
        self.config_file = config_file
        self.file_priority = DEFAULT_FILE_PRIORITY  # Resolve duplicate keys by file order
        self.page_size = DEFAULT_PAGE_SIZE  # Table rows per page
        self.last_directory = ''  # Where the last file dialog was opened

    def reset(self):
        """Restore default settings"""
        self.file_priority = DEFAULT_FILE_PRIORITY
        self.page_size = DEFAULT_PAGE_SIZE
        self.last_directory = ''

    def load(self):
        """Load saved configuration"""
        self.reset()
        if not os.path.exists(self.config_file):
            logger.debug("No configuration at %s, using defaults", self.config_file)
            return

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except (OSError, ValueError) as e:
            # If config file is corrupted, keep the defaults
            logger.warning("Failed to load configuration from %s, using defaults: %s", self.config_file, e)
            return

        if not isinstance(config, dict):
            logger.warning("Configuration in %s is not an object, using defaults", self.config_file)
            return

        file_priority = config.get('file_priority', DEFAULT_FILE_PRIORITY)
        if isinstance(file_priority, bool):
            self.file_priority = file_priority
        else:
            logger.warning("Ignoring invalid file_priority: %r", file_priority)

        page_size = config.get('page_size', DEFAULT_PAGE_SIZE)
        # bool is an int subclass
        if isinstance(page_size, int) and not isinstance(page_size, bool) and page_size > 0:
            self.page_size = page_size
        else:
            logger.warning("Ignoring invalid page_size: %r", page_size)

        last_directory = config.get('last_directory', '')
        if isinstance(last_directory, str) and (not last_directory or os.path.isdir(last_directory)):
            self.last_directory = last_directory

        logger.info("Configuration loaded from %s", self.config_file)

    def save(self):
        """Save configuration"""
        config = {
            'file_priority': self.file_priority,
            'page_size': self.page_size,
            'last_directory': self.last_directory
        }
        try:
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(config, f, indent=2)
        except OSError as e:
            logger.warning("Could not save configuration to %s: %s", self.config_file, e)

"""
Application entry point for the hotel registry console.

This module:
- Loads settings and configures logging.
- Initializes the MongoEngine connection (via data.mongo_setup.global_init).
- Prints the application header and runs the owner console until exit.
"""

from colorama import Fore, init as colorama_init

import hotel_registry.data.mongo_setup as mongo_setup
import hotel_registry.program_hosts as program_hosts
from hotel_registry.infrastructure.logging import configure_logging
from hotel_registry.infrastructure.settings import settings


def main():
    colorama_init()
    configure_logging(settings.LOG_LEVEL)
    mongo_setup.global_init() # Register the MongoEngine connection alias 'core'.

    print_header()

    try:
        program_hosts.run()
    except KeyboardInterrupt:
        return # Allow clean termination with Ctrl+C without a stack trace.


def print_header():
    print(Fore.WHITE + '**************  ' + settings.APP_NAME.upper() + '  **************')
    print(Fore.GREEN + '  Manage your hotels and their subscriptions.')
    print(Fore.WHITE + '********************************************')
    print()


if __name__ == '__main__':
    main()

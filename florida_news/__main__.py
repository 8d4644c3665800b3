"""Main module for the florida_news server.

This module allows the server to be run as a Python module using:
python -m florida_news

It delegates to the server application's main function.
"""

from florida_news.server.app import main

if __name__ == "__main__":
    main()

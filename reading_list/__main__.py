"""Main module for reading_list.

This module allows the application to be run as a Python module using:
python -m reading_list

It delegates to the application's main function.
"""

from reading_list.app import main

if __name__ == "__main__":
    main()

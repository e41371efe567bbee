# -*- coding: utf-8 -*-
"""Allows `python -m filecipher`."""

from .main import main

main()

"""
Persistence layer.

``UserStore`` owns every statement issued against the ``User`` table
and reports expected results as enum outcomes rather than exceptions.
"""

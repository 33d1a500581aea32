"""Notification engine for feedback cycles.

The ``app`` package is a regular package so that it wins over any namespace
package of the same name installed in the environment.
"""

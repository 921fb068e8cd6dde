"""Tests for Squad Ace."""

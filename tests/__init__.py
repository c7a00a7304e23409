"""Tests - Test suite for coset index translation."""

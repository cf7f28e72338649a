"""Tests for the StudyQuest integration."""

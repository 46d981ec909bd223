"""Augmenting-path max-flow algorithms over the arc-arena graph model."""

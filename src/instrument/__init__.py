"""Scalac argument assembly, source root recording and the pre-compile run."""

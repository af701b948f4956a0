"""ActionCheck GitHub integration.

Reads the runner environment and event payload, parses the changed-file
list, and writes step outputs and job summaries.
"""

"""Application Layer.

Infrastructure adapters and the command-line entry point that orchestrate
domain logic. This layer handles I/O; the domain layer never does.
"""

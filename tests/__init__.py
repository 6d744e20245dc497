"""
Test suite for the pagedoc project.

Unit tests per concern (units, commands, geometry, history, I/O) plus
integration tests through the PageEditor facade and the CLI.
"""

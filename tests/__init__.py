"""
webhatch test suite
===================

Test Modules
------------
- test_models.py: Enumerations, SessionState and WizardConfig
- test_files.py: README/LICENSE/.gitignore/page template rendering
- test_generators.py: Project generators and the dispatch table
- test_runtime.py: Node.js version parsing and the nvm probe
- test_runner.py: External command execution and verbose echo
- test_wizard.py: The stage pipeline, stage by stage and end to end
- test_cli.py: Command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Skip the end-to-end pipeline runs
    pytest -m "not integration"

    # Run a specific test class
    pytest tests/test_wizard.py::TestRuntimeGate
"""

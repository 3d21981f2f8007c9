# Vulture whitelist file
# This file contains false positives that vulture incorrectly flags as dead code.
# These are typically Pydantic validators and settings, pytest fixtures, etc.
#
# Usage: python3 -m vulture bolt_inventory tests vulture_whitelist.py

# =============================================================================
# Pydantic validators and model configuration
# =============================================================================
_pattern_compiles  # models.py - GroupPattern.pattern field validator
model_config  # models.py - pydantic model configuration
populate_by_name  # models.py - SSHConfig accepts field names and aliases

# =============================================================================
# Pydantic settings (read from BOLT_INVENTORY_* environment variables)
# =============================================================================
env_prefix  # config.py - Settings.Config
env_file  # config.py - Settings.Config
case_sensitive  # config.py - Settings.Config

# =============================================================================
# Public entry points
# =============================================================================
main  # main.py - console script bolt-dynamic-inventory

# =============================================================================
# Pytest fixtures (injected by name)
# =============================================================================
test_settings  # conftest.py
fake_runner  # conftest.py
mock_orbs  # conftest.py
mock_vmpooler_payload  # conftest.py
mock_vmpooler_json  # conftest.py
tools_on_path  # test_config_validation.py
orbs_on_stub  # test_main.py

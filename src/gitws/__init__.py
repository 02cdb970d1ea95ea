"""gitws — isolated Git identities per workspace.

Each workspace gets its own SSH key, a managed ``Host`` block in the SSH
client config, an ``includeIf`` entry in the global Git config and a
per-workspace Git config file.
"""

__version__ = "0.3.0"

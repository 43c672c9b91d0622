# Shared model, support functions, logging and configuration

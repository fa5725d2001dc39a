# hitzkale/utils - logging, config and timing helpers for the app layer

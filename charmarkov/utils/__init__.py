# charmarkov/utils - logging helpers and config

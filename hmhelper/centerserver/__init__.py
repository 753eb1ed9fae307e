"""User credentials and reply format for the central coin service."""
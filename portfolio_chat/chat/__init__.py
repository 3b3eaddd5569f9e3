"""Chat proxy: request handling and the MiniMax completion client."""

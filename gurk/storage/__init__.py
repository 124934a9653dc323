"""Storage of channels, messages, names and metadata: in memory, forgetful or JSON."""
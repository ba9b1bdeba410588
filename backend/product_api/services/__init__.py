"""Service Layer: async operations that combine core validation with store IO."""

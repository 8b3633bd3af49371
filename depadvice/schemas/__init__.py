"""Input schemas for serialized dependency facts."""

"""Infrastructure layer: persistence, file storage, identity and notifications."""

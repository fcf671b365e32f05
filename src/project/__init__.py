"""Project model, pom loading and the property bridge."""

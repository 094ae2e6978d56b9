"""Research entries and automated web research for editors."""

"""Pure domain objects: clock and record DTOs."""

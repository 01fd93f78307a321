"""Testing helpers – fakes for the store and clock ports."""

"""Sample XML documents used as packaged resources by the tests."""

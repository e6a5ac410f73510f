"""Exception hierarchy tests. Maps to: texttok/exceptions/"""

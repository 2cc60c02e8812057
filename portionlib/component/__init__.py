'''Components used by the apportionment functions, referencable by name.'''

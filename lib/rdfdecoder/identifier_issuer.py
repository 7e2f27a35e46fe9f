class IdentifierIssuer(object):
    """
    An IdentifierIssuer hands out blank node labels from a counter that only
    ever goes up. The first label issued is '<prefix>1'.
    """

    def __init__(self, prefix='_:b'):
        """
        Initializes a new IdentifierIssuer.

        :param prefix: the prefix to use ('<prefix><counter>').
        """
        self.prefix = prefix
        self.counter = 0
        self.existing = {}

    def get_id(self, old=None):
        """
        Gets a new label, or the label already issued for the given old
        identifier.

        :param [old]: an identifier to map to a stable label.

        :return: the label.
        """
        if old is not None and old in self.existing:
            return self.existing[old]

        self.counter += 1
        id_ = self.prefix + str(self.counter)

        if old is not None:
            self.existing[old] = id_

        return id_

    def has_id(self, old):
        """
        Returns True if the given old identifier has already been assigned a
        label.
        """
        return old in self.existing

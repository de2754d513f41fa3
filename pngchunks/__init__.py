"""
# PNG chunks for humans.

A PNG file, after its signature, is nothing more than a sequence of chunks:
each one tells how long its data is, what kind of data it is and carries
a checksum of it.

Two basic main operations are defined for a chunk

 1. unpack(): read the binary data from a stream and build the high-level
    representation of it. A stream ending exactly at a chunk boundary is not
    an error, a stream ending in the middle of one is.

 2. pack(): encode the high-level representation into binary data, exactly
    as it was read (no field is recalculated).

Since a chunk stream is usually assembled from different pieces (the signature,
the chunks read from a file, new chunks created in memory) there is also
SequentialReader that presents a list of sources as a single stream.
"""

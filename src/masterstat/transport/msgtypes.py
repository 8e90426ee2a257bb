# Out-of-band marker prefixing connectionless QuakeWorld packets
OOB_MARKER = b"\xff\xff\xff\xff"

# Client to master
REQ_SERVERS = b"c\n\x00"

# Master to client
RESP_SERVERS = OOB_MARKER + b"d\n"
RESP_UNKNOWN = OOB_MARKER + b"n"

# One server record: 4 byte IPv4 + 2 byte port
RECORD_SIZE = 6

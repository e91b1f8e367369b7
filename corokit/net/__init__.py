"""Networking: status codes and a non-blocking TCP client."""
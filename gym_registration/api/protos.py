"""
Сообщения и сервисы gRPC, собранные из .proto во время импорта.

grpc.protos_and_services (grpcio-tools) компилирует файл на лету, поэтому
сгенерированные *_pb2.py в репозитории не хранятся. Путь к .proto задаётся
относительно корня, лежащего в sys.path.
"""

import os

import grpc

PROTO_PATH = os.path.join("gym_registration", "protos", "gym_registration.proto")

gym_registration_pb2, gym_registration_pb2_grpc = grpc.protos_and_services(PROTO_PATH)

__all__ = ["PROTO_PATH", "gym_registration_pb2", "gym_registration_pb2_grpc"]

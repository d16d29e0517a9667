import os
import random
from datetime import datetime, timedelta

hosts = ["ceclnx01"]
users = ["admin", "root", "oracle", "test"]
sources = ["10.0.0.10", "192.168.1.1", "172.16.4.2"]

os.makedirs("data/raw", exist_ok=True)

with open("data/raw/sample_capture.log", "w") as f:
    # Header block, as saved by `curl -i`
    f.write("HTTP/1.1 200 OK\r\n")
    f.write("Content-Type: text/plain\r\n")
    f.write("\r\n")

    base_time = datetime(2021, 6, 10, 3, 0, 0)
    # Normal traffic: occasional failures followed by success
    for i in range(40):
        t = base_time + timedelta(seconds=i * 45)
        pid = random.randint(10000, 99999)
        outcome = "Failed" if random.random() < 0.3 else "Accepted"
        f.write(f"{t.strftime('%b %d %H:%M:%S')} {hosts[0]} sshd[{pid}]: {outcome} password for "
                f"{random.choice(users)} from {random.choice(sources)} port 22 ssh2\n")

    # Brute-force burst from a single session
    attack_time = base_time + timedelta(minutes=35)
    for i in range(8):  # 8 failures 3s apart -> frequency detections from the 4th on
        t = attack_time + timedelta(seconds=i * 3)
        f.write(f"{t.strftime('%b %d %H:%M:%S')} {hosts[0]} sshd[66666]: Failed password for "
                f"invalid user {random.choice(users)} from 218.92.0.188 port 22 ssh2\n")

    # Banned address
    t = attack_time + timedelta(minutes=1)
    f.write(f"{t.strftime('%b %d %H:%M:%S')} {hosts[0]} sshd[55555]: Failed password for root "
            f"from 61.177.172.13 port 22 ssh2\n")

"""AWS 자격 증명 해석

기본 자격 증명 체인에서 자격 증명을 읽고, role이 지정되면 STS AssumeRole로
임시 자격 증명을 받아 botocore가 만료 전에 자동 갱신하도록 한다.
"""

import logging
import threading

import boto3
import botocore.session
from botocore.credentials import RefreshableCredentials
from botocore.exceptions import BotoCoreError, ClientError

from dms_exporter.config import ROLE_SESSION_NAME

logger = logging.getLogger(__name__)


class CredentialError(Exception):
    """자격 증명을 얻지 못해 이번 폴링 주기를 진행할 수 없음"""


class CredentialResolver:
    """region/role 설정으로부터 자격 증명이 있는 boto3 Session을 만든다.

    성공한 Session은 캐시되어 이후 주기에서 재사용된다. 실패하면 아무것도
    캐시하지 않으므로 다음 주기에서 다시 시도한다.
    """

    def __init__(
        self,
        region: str,
        role_arn: str = "",
        role_session_name: str = ROLE_SESSION_NAME,
        sts_client=None,
    ) -> None:
        self.region = region
        self.role_arn = role_arn
        self.role_session_name = role_session_name
        self._sts_client = sts_client
        self._session: boto3.Session | None = None
        self._lock = threading.Lock()

    def resolve(self) -> boto3.Session:
        with self._lock:
            if self._session is None:
                self._session = self._build_session()
            return self._session

    def _build_session(self) -> boto3.Session:
        try:
            session = boto3.Session(region_name=self.region)
            ambient = session.get_credentials()
        except (BotoCoreError, ClientError) as exc:
            raise CredentialError(f"unable to load AWS credentials: {exc}") from exc
        if ambient is None:
            raise CredentialError("unable to load AWS credentials from the default provider chain")

        if not self.role_arn:
            return session

        sts = self._sts_client or session.client("sts", region_name=self.region)
        credentials = RefreshableCredentials.create_from_metadata(
            metadata=self._assume_role(sts),
            refresh_using=lambda: self._assume_role(sts),
            method="sts-assume-role",
        )

        # boto3 exposes no public setter for session credentials
        botocore_session = botocore.session.get_session()
        botocore_session._credentials = credentials
        botocore_session.set_config_variable("region", self.region)
        logger.info("Assumed role %s in %s", self.role_arn, self.region)
        return boto3.Session(botocore_session=botocore_session)

    def _assume_role(self, sts) -> dict:
        try:
            response = sts.assume_role(
                RoleArn=self.role_arn,
                RoleSessionName=self.role_session_name,
            )
        except (BotoCoreError, ClientError) as exc:
            raise CredentialError(f"aws assume role {self.role_arn}: {exc}") from exc

        creds = response["Credentials"]
        return {
            "access_key": creds["AccessKeyId"],
            "secret_key": creds["SecretAccessKey"],
            "token": creds["SessionToken"],
            "expiry_time": creds["Expiration"].isoformat(),
        }
